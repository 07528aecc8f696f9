# payprocess/utils/__init__.py
"""Wire-level helpers shared by the payment models."""
