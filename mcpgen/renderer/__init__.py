# Expansion of project configurations into server source trees

from .engine import TemplateRenderer, python_identifier, render_summary

__all__ = ["TemplateRenderer", "python_identifier", "render_summary"]
