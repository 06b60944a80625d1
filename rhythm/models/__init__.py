"""
Pydantic models for the daily rhythm engine.
"""
