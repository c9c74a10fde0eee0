"""Core models and application plumbing."""

from presentation_builder.core.models import ColumnDescriptor, Project, ProjectType, TableStats

__all__ = ["ColumnDescriptor", "Project", "ProjectType", "TableStats"]
