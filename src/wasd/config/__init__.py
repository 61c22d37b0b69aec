"""Configuration loading and logging setup for wasd."""
