"""AL language front end and tree-walking interpreter.


File: __init__.py
Version: 0.1.0
License: MIT
"""

__version__ = "0.1.0"
