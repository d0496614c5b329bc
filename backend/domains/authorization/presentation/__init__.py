"""Authorization Domain - Presentation Layer"""
