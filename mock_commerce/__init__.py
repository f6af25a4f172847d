"""Mock commerce service for local development and tests"""
