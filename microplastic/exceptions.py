# microplastic/exceptions.py

class MicroplasticException(Exception):
    """기본 예외 클래스"""
    def __init__(self, message):
        super().__init__(message)
        self.message = message

# 클라이언트 측 예외 (4xx)
class ClientException(MicroplasticException):
    """클라이언트 측 오류"""

class ValidationFailedException(ClientException):
    """필수 필드 누락 등 데이터 검증 실패"""

class ConflictException(ValidationFailedException):
    """기존 데이터와 충돌할 때"""

class DuplicateSpeciesException(ConflictException):
    """이미 존재하는 어종명으로 추가/수정할 때"""

class NotFoundException(ClientException):
    """데이터를 찾지 못했을 때"""

class RegionNotFoundException(NotFoundException):
    """지역을 찾을 수 없을 때"""

class TimeRangeNotFoundException(NotFoundException):
    """기간을 찾을 수 없을 때"""

class SpeciesNotFoundException(NotFoundException):
    """어종을 찾을 수 없을 때"""

# 서버 측 오류 (5xx)
class ServerException(MicroplasticException):
    """서버 측 오류"""

class StorageUnavailableException(ServerException):
    """데이터 파일을 읽거나 쓸 수 없을 때"""

class UpstreamUnavailableException(ServerException):
    """외부 해양 데이터에서 유효한 결과를 얻지 못했을 때"""
