#!/usr/bin/env python3
"""Start the Shed Frame Generator API server."""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "shedframe.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["shedframe"],
        log_level=os.environ.get("SHEDFRAME_LOG_LEVEL", "info"),
    )
