"""Validation of JSON documents against REST resource schemas."""
