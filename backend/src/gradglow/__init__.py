"""GradGlow internship core: listings, applications and the client state store"""

__version__ = "1.0.0"
