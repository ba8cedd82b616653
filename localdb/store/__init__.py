"""Record storage — schema-checked collections persisted per server directory."""
