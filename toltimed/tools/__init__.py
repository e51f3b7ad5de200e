"""Mock external collaborators: catalog, practitioner directory, submission endpoint."""
