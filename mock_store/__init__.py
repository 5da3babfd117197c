"""Mock store backend"""
