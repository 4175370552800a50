"""Load planning orchestration and command-line entry point."""
