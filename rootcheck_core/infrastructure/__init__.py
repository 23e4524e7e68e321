"""
Infrastructure layer: process, filesystem, package registry and native
bridge collaborators, plus logging and shared error handling.
"""
