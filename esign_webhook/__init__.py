"""E-sign webhook backend: expands signing requests and sends them to BoldSign."""
