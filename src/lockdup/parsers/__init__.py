"""Lock file parsers: key decoders plus object and text extractors."""
