"""Stores Domain - Presentation Layer"""
