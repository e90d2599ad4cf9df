"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to the file system:
- Network storage (raw edge CSV, adjacency list CSV)
- Report output (path, performance and detail CSV reports)
"""
