"""Network and git services used while creating a project."""
