"""Command-line front end for webscraper."""
