"""ExpertScore -- multi-factor expert scoring and ranking for research questions."""

__version__ = "0.1.0"
