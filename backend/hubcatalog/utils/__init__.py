"""
Hub Catalog Utility Functions
SQL statement builders shared by the repositories
"""

from hubcatalog.utils.mutation_builders import InsertBuilder  # noqa: F401
from hubcatalog.utils.query_builder import QueryBuilder, validate_identifier  # noqa: F401
