"""Inkpost static blog generator.

This package turns a directory of Markdown posts with front matter into a
static site, using Jinja2 page layouts and Pygments syntax highlighting.

The main entry point is the CLI module, which provides commands for scaffolding
new projects, creating posts and building the site.

Pipeline overview:
- content: discovers and reads post sources, assembles Post records
- frontmatter: splits and validates the metadata block of a post
- renderers: converts Markdown bodies to HTML
- templates: merges records into header/body/footer layouts
- build: runs the stages in order and reports failures by stage
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
