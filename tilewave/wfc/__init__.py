"""Wave Function Collapse engine and its tile model."""
