"""Control file parsing: field dispatch, compound decomposers and the stream driver."""
