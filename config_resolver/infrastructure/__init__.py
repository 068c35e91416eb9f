"""Infrastructure layer: property-file parsing and file/resource IO."""
