"""
Hub Catalog API Routes Package
"""
