"""cli - 명령줄 진입점과 콘솔 출력"""
