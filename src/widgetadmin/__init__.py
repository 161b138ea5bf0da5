"""WidgetAdmin - administrative backend for the embeddable AI chat widget."""

__version__ = "0.1.0"
