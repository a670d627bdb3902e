"""Application-wide constants."""

# Project status values
class ProjectStatus:
    """Project status labels shared with the Monday.com board."""
    NOT_STARTED = "Not Started"
    COMPLETED = "Completed"


class FileType:
    """Preview widget kinds for a delivered file."""
    VIDEO = "video"
    IMAGE = "image"
    PDF = "pdf"
    OTHER = "other"


DEFAULT_PRIORITY = "Urgent"
DEFAULT_FILE_NAME = "Project File"
UNKNOWN_USER_NAME = "Unknown User"

# Supabase Storage bucket for client uploads
PROJECT_FILES_BUCKET = "project-files"
