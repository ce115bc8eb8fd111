from .scoring import ScoreResult, score, score_exam, grade_band

__all__ = ['ScoreResult', 'score', 'score_exam', 'grade_band']
