"""Filesystem-backed implementations of the domain interfaces."""
