"""Gist creation tool for gistkit."""

from .client import GistClient
from .creator import GistCreator
from .models import GistOptions, GistRequest, GistResult
from .payload import prepare_gist_request

__all__ = ['GistClient', 'GistCreator', 'GistOptions', 'GistRequest', 'GistResult', 'prepare_gist_request']
