"""
Tests for the guild siege log parser.

This package contains tests for:
- Entry tokenizing and kill extraction
- Player and guild aggregation, lives and rankings
- Configuration loading
- Log storage, the HTTP API and the CLI
"""
