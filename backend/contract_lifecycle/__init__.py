"""계약서 작성·버전 관리·다중 승인·체결·만료를 관리하는 백엔드 패키지입니다."""

__version__ = "1.0.0"
