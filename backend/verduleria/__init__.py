"""
Verduleria - Backend API
"""
