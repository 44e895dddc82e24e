"""
Timestampr - make legacy NOT NULL TIMESTAMP columns nullable.

MySQL 5.6 changed how implicit TIMESTAMP defaults are handled, which leaves
older schemas with NOT NULL timestamp columns carrying invalid defaults. This
package discovers those columns in one schema and rewrites them as
``TIMESTAMP NULL``.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
