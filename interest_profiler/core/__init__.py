"""
Core utilities: domain exceptions shared by sources, analytics, vault and CLI.
"""
