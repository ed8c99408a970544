"""
classification of the mapping of paired-end read templates for structural variant discovery
"""
__version__ = '1.0.0'
