from typing import List

from tutorhub.common import CamelModel, ObjectIdStr


class ExamSubmission(CamelModel):
    student_id: ObjectIdStr
    lesson_id: ObjectIdStr
    # Chosen choice index per question, in question order
    answers: List[int]


class ExamGrade(CamelModel):
    correct_answers: int
    total_questions: int
    score: int
    passed: bool
