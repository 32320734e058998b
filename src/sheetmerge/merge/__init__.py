"""Merge engine and output writer."""
