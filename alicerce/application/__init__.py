"""Application layer: engine facade, ports and result DTOs."""
