"""Configuration — defaults and the answers-file loader."""
