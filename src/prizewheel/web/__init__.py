"""HTTP adapter for the browser wheel."""
