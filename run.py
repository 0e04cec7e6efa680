#!/usr/bin/env python3
"""
CLI entry point for the guest document relay.
"""
from villa_docs.main import main

if __name__ == "__main__":
    main()
