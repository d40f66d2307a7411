# mentor_network/constants.py
class ErrorMessages:
    UNAUTHORIZED = "Unauthorized"
    USER_NOT_FOUND = "User not found"
    MENTOR_NOT_FOUND = "Mentor not found"
    REQUEST_NOT_FOUND = "Follow request not found"
    ONLY_MENTEES_SEND = "Only mentees can send requests"
    ONLY_MENTORS_RESPOND = "Only mentors can respond"
    SELF_FOLLOW = "Cannot follow yourself"
    TARGET_NOT_MENTOR = "Requests can only be sent to mentors"
    INVALID_ACTION = "Action must be ACCEPT or REJECT"
    ALREADY_RESPONDED = "Follow request has already been answered"
    EMAIL_IN_USE = "Email already in use"
    INVALID_CREDENTIALS = "Invalid credentials"
    STORE_UNAVAILABLE = "Entity store is unavailable"
    CONSTRAINT_VIOLATION = "Database constraint violation"

class BusinessRules:
    MIN_NAME_LENGTH = 1
    MAX_NAME_LENGTH = 100
    MIN_PASSWORD_LENGTH = 6
    MIN_YEAR_OF_STUDY = 1
    MAX_YEAR_OF_STUDY = 10
