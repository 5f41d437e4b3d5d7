"""
Log pipeline facade and its exceptions.
"""
