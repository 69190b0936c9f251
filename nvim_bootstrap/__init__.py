"""nvim-bootstrap: provision a Neovim development environment."""

__version__ = "0.1.0"
