"""
Test support for tabula tests.

``models`` holds the dataclass models the mapping and table tests share.
"""
