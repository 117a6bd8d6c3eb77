"""
Command line interface for orchestration stacks.
"""
