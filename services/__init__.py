"""services 패키지: 문의 쿼리/저장소/알림/엑셀"""
