"""
Test suite for PyFastResample package.

This test suite covers:
- Import tests for all modules and submodules
- Unit tests for the resampling kernels, element kinds and helpers
- Integration tests for slice display workflows
- CLI commands

Run with: pytest
"""
