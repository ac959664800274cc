"""Domain layer: enums, entities and value objects"""
