"""Cross-cutting helpers: logging setup and the resolver's own settings."""
