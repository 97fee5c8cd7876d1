"""GitLab project scanning: manifest extraction and the page loop."""
