"""HTTP routes: HLS fixture catch-all and the /api/v1 inspection API."""
