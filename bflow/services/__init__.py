"""Version store, branch classification and the workflow engine."""
