"""Domain layer: configuration domains, their registry, and runtime properties.

Domain modules do not read files themselves; loading is delegated to the
infrastructure ResourceLoader injected into the registry.
"""
