"""Services package: persistence, repositories and external collaborators."""
