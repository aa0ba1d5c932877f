"""Schema Tag Provider 도메인 레이어."""
