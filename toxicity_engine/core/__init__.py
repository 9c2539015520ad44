"""Configuration, domain models, errors, reference catalog and the engine facade"""
