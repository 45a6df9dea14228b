"""Qt UI strings used across the player widgets."""

WINDOW_TITLE: str = "EscapeQt"

READY_TITLE_TEMPLATE: str = "Ready to start {title}?"
READY_BUTTON: str = "Enter Fullscreen && Start"
NEXT_BUTTON: str = "Next"
SUBMIT_BUTTON: str = "Submit"
RETRY_BUTTON: str = "Retry Submission"
LOADING_MESSAGE: str = "Loading questions..."
SUBMITTING_MESSAGE: str = "Submitting your answers..."

WARNING_TITLE: str = "Warning!"
WARNING_MESSAGE: str = (
    "Don't leave fullscreen or switch tabs again, or your quiz will end."
)
VIOLATION_TITLE: str = "Violation Detected"
VIOLATION_MESSAGE_TEMPLATE: str = "{reason} detected multiple times. Quiz will be submitted."
VIOLATION_FOOTER: str = "Your attempt is being recorded and will be reviewed."
NAVIGATION_BLOCKED_MESSAGE: str = "You cannot go back during the quiz!"
LEAVE_QUIZ_TITLE: str = "Leave Quiz?"
LEAVE_QUIZ_MESSAGE: str = (
    "Your progress is saved, but the timer keeps its place. Leave the quiz now?"
)

EMPTY_BANK_TEMPLATE: str = "No questions available for Level {level}."
LOAD_FAILED_MESSAGE: str = "Failed to load questions."
SUBMISSION_FAILED_MESSAGE: str = "Failed to submit score."

QUALIFIED_MESSAGE: str = "Congratulations, you qualified for the next level!"
NOT_QUALIFIED_MESSAGE: str = "You did not reach the qualification score this time."
FINAL_LEVEL_MESSAGE: str = "You have completed the final level."
LEADERBOARD_TITLE: str = "Leaderboard"

LOGIN_TITLE: str = "Player Login"
NAME_PROMPT: str = "Your name:"
COLLEGE_PROMPT: str = "Your college:"
NOT_ELIGIBLE_MESSAGE: str = "You are not eligible for this level yet."
LEVEL_LOCKED_MESSAGE: str = "This level is locked. Qualify in the previous level first."
