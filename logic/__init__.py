"""Pure decision logic: orientation, prompts, reply decoding and errors."""
