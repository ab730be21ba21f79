"""
Example school records for Sparkyville High School.

The transport seeds every session with EXAMPLE_USER_CONTEXT; the tools read
grades, events and announcements from the tables below.
"""
from school_agent.agent.state import ContextStore, Dependent


EXAMPLE_USER_CONTEXT = ContextStore(
    subject_id=4112,
    subject_name="Francis Smith",
    dependents=[
        Dependent(
            id=3734,
            name="Evelyn Smith",
            grade_level=9,
            activities=["Choir", "Drama Club"],
        ),
        Dependent(id=9433, name="Evan Smith", grade_level=11, activities=["Chess Club"]),
    ],
)


EXAMPLE_GRADES: dict[int, list[dict]] = {
    3734: [
        {"subject": "Biology", "assignment": "Cell Structure Lab", "grade": "A-", "date": "2024-09-27"},
        {"subject": "English 9", "assignment": "Short Story Essay", "grade": "B+", "date": "2024-10-02"},
        {"subject": "Algebra I", "assignment": "Unit 2 Quiz", "grade": "A", "date": "2024-10-04"},
        {"subject": "World History", "assignment": "Ancient Civilizations Project", "grade": "A", "date": "2024-10-09"},
        {"subject": "Spanish I", "assignment": "Vocabulary Test", "grade": "B", "date": "2024-10-11"},
    ],
    9433: [
        {"subject": "Chemistry", "assignment": "Stoichiometry Exam", "grade": "B", "date": "2024-09-30"},
        {"subject": "AP US History", "assignment": "Document-Based Question", "grade": "A-", "date": "2024-10-03"},
        {"subject": "Pre-Calculus", "assignment": "Functions Test", "grade": "C+", "date": "2024-10-07"},
        {"subject": "English 11", "assignment": "Gatsby Analysis", "grade": "A", "date": "2024-10-10"},
        {"subject": "Computer Science", "assignment": "Sorting Algorithms Lab", "grade": "A", "date": "2024-10-14"},
    ],
}


EXAMPLE_EVENTS: list[dict] = [
    {
        "name": "Fall Choir Concert",
        "date": "2024-10-24",
        "location": "Sparkyville Auditorium",
        "description": "The concert choir performs its fall program. Choir members arrive by 6:00 PM.",
        "activity": "Choir",
    },
    {
        "name": "Drama Club Auditions: Into the Woods",
        "date": "2024-10-29",
        "location": "Black Box Theater",
        "description": "Auditions for the spring musical. Sign-up sheet is outside room 112.",
        "activity": "Drama Club",
    },
    {
        "name": "Regional Chess Tournament",
        "date": "2024-11-02",
        "location": "Sparkyville Library Commons",
        "description": "Chess Club hosts six visiting schools. Families are welcome to watch.",
        "activity": "Chess Club",
    },
    {
        "name": "Parent-Teacher Conferences",
        "date": "2024-11-07",
        "location": "Main Building",
        "description": "Sign up for 10-minute slots with each teacher through the front office.",
        "activity": None,
    },
    {
        "name": "Thanksgiving Break",
        "date": "2024-11-27",
        "location": None,
        "description": "No school November 27 through November 29.",
        "activity": None,
    },
]


EXAMPLE_ANNOUNCEMENTS: list[dict] = [
    {
        "title": "Picture Day Retakes",
        "date": "2024-10-15",
        "body": "Students who missed picture day or want a retake can visit the library on October 22.",
    },
    {
        "title": "New Late Arrival Procedure",
        "date": "2024-10-08",
        "body": "Students arriving after 8:05 AM must check in at the front office before going to class.",
    },
    {
        "title": "Cafeteria Menu Update",
        "date": "2024-10-01",
        "body": "A salad bar is now available at lunch every Tuesday and Thursday.",
    },
    {
        "title": "Fall Sports Schedules Posted",
        "date": "2024-09-20",
        "body": "Game schedules for soccer, volleyball and cross country are posted on the athletics page.",
    },
]
