"""
Utility Modules for ssml-ms.

    - text.py: XML escaping and plain-text wrapping
    - timeit.py: Performance measurement
"""
