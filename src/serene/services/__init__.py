"""SERENE service layer: detection, session flow, guidance and analytics."""
