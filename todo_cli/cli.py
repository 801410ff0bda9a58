#!/usr/bin/env python3
# File Summary: Command line entry point that delegates to the main application.

"""
todo-cli - personal task list

A simple command-line interface for adding, completing, removing and listing todos.
This is the main entry point that users will call.
"""

from .main import main

if __name__ == "__main__":
    main()
