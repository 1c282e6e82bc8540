"""
LP 분석 오류 정의

입력 전제조건 위반은 즉시 실패한다. I/O가 없으므로 재시도 의미는 없다.
"""


class LPAnalysisError(ValueError):
    """LP 분석 코어 오류의 기반 클래스"""
    pass


class InvalidDecimals(LPAnalysisError):
    """토큰 소수점 자릿수가 음수이거나 정수가 아님"""
    pass


class ParseError(LPAnalysisError):
    """fee growth 문자열이 올바른 음이 아닌 정수가 아님"""
    pass


class InvalidInput(LPAnalysisError):
    """가격, 기간 등 스칼라 입력이 전제조건을 위반함"""
    pass


class InsufficientData(LPAnalysisError):
    """계산에 필요한 스냅샷 수가 부족함"""
    pass
