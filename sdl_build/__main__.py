"""Runs the SDL build system from the command line"""
import sys

from sdl_build.main import main

if __name__ == "__main__":
    sys.exit(main())
