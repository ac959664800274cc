"""Persistence: ORM models, row mapping and repositories"""
