"""Products Domain - Presentation Layer"""
