#!/usr/bin/env python
"""Wrapper script to run uvicorn against the bin tracker app."""
import uvicorn
from dotenv import load_dotenv

if __name__ == "__main__":
    load_dotenv()

    from bin_tracker.api.dependencies import get_config

    config = get_config()
    uvicorn.run("bin_tracker.main:app", host=config.host, port=config.port)
