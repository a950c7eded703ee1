"""Core types shared across the SDK: errors, results, events and models."""
