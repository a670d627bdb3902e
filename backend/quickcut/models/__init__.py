"""Models package."""
from quickcut.models.profile import Profile
from quickcut.models.project import Project
from quickcut.models.feedback import Feedback

__all__ = ["Profile", "Project", "Feedback"]
