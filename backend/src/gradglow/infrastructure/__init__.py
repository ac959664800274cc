"""Infrastructure layer: persistence and external services"""
