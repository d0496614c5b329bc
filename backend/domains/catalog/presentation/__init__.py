"""Catalog Domain - Presentation Layer"""
