#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Contact submission helpers for the Spark client.

Provides the payload sanitizer that converts v1 lead data to the v2 contact schema.
"""

from .sanitizer import is_empty, remove_empty_fields, sanitize_v1_fields

__all__ = ["is_empty", "remove_empty_fields", "sanitize_v1_fields"]
