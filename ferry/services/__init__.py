"""
Ferry services: platform classification, target resolution and transport
plugin loading.
"""
