"""Newsdesk: article workflow, query and trending backend for a regional news site."""
