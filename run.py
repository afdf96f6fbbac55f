#!/usr/bin/env python3
"""Run the NutriTrack API server."""

from nutritrack.main import run

if __name__ == "__main__":
    run()
