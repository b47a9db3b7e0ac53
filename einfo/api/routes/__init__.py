"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Static paths (/reorder, /batch) are declared before /{id} paths
"""
