"""검증기 패키지 — 레코드 수준 검증 로직.

Validators package — Record-level validation shared by services.
"""
