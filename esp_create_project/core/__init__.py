"""Configuration, logging, errors and the creation pipeline."""
