"""
보스 엔진 커스텀 예외 클래스 정의

모든 예외는 BossEngineError를 상속받아 일관된 에러 처리를 제공합니다.
전투 기록/점수 계산/보상 분배 자체는 예외를 던지지 않으며,
여기 정의된 예외는 조회 실패나 잘못된 호출 순서에만 사용됩니다.
"""
from uuid import UUID


class BossEngineError(Exception):
    """보스 엔진 기본 예외 클래스"""

    def __init__(self, message: str = "알 수 없는 오류가 발생했습니다"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# 보스 등급 관련 예외
# =============================================================================


class InvalidBossTierError(BossEngineError):
    """존재하지 않는 보스 등급"""

    def __init__(self, level: int):
        self.level = level
        super().__init__(f"존재하지 않는 보스 등급입니다: {level} (1~4)")


# =============================================================================
# 인카운터 관련 예외
# =============================================================================


class EncounterError(BossEngineError):
    """인카운터 관련 기본 예외"""
    pass


class EncounterNotFoundError(EncounterError):
    """진행 중인 인카운터가 없음"""

    def __init__(self, boss_id: UUID):
        self.boss_id = boss_id
        super().__init__(f"진행 중인 보스 전투를 찾을 수 없습니다: {boss_id}")


class EncounterAlreadyExistsError(EncounterError):
    """이미 진행 중인 인카운터"""

    def __init__(self, boss_id: UUID):
        self.boss_id = boss_id
        super().__init__(f"이미 진행 중인 보스 전투입니다: {boss_id}")


# =============================================================================
# 계산 관련 예외
# =============================================================================


class ScalingComputationError(BossEngineError):
    """배율 계산 결과가 유효하지 않음 (NaN/Infinity)"""

    def __init__(self, field_name: str, value: float):
        self.field_name = field_name
        self.value = value
        super().__init__(f"배율 계산 결과가 유효하지 않습니다: {field_name}={value}")
