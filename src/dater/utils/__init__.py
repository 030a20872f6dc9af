"""Calendar engine helpers, name tables, logging and errors."""
