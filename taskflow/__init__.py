"""TaskFlow: task management backend with AI-assisted classification and insights."""

__version__ = "0.1.0"
