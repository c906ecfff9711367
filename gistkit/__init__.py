"""gistkit: collect editor and file content and publish it as a GitHub Gist."""
