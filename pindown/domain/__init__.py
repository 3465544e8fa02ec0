"""Domain layer: exceptions, enums and value objects. No I/O."""
