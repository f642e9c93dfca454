"""
Catalog services: registration workflow, intake and metrics
"""
