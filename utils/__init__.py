"""
utils package
-------------

Contains utility modules shared by the roster engine.

Includes the configuration constants loader, logging setup, student id and
calendar helpers, and configuration validation.
"""
