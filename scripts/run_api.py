#!/usr/bin/env python
from __future__ import annotations

import argparse
import uvicorn

def main():
    p = argparse.ArgumentParser(description="Run the mix log HTTP API.")
    p.add_argument("--host", type=str, default="0.0.0.0", help="Bind address")
    p.add_argument("--port", type=int, default=8000, help="Bind port")
    p.add_argument("--reload", action="store_true", help="Reload on code changes (dev)")
    args = p.parse_args()

    uvicorn.run("apps.api.main:app", host=args.host, port=args.port, reload=args.reload)

if __name__ == "__main__":
    main()
