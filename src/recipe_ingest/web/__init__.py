"""HTTP functions: record, process and fetch recipes."""
