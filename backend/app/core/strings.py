"""Textos visibles del bloque Recent Courses."""

COMPONENT = "block_course_recent"

STRINGS: dict[str, str] = {
    "pluginname": "Recent Courses",
    "course_recent": "Recent Courses",
    "settings": "User settings",
    "breadcrumb": "Recent Courses user settings",
    "userlimit": "Maximum number of courses to display",
    "userlimit_help": "Specify the maximum number of courses to display in the Recent Course block here.",
    "default_max": "Max number of courses",
    "default_max_desc": (
        "The maximum number of recently visited courses the block will display by default. "
        "This can be overwritten by the user if they have the capability to do so."
    ),
    "musthaverole": "User must have a role in the course",
    "musthaverole_desc": "Check this if the user must have a role to view a course in the recently visited courses",
    "error1": "The number cannot be less than 1",
    "error2": "The number cannot be greater than 10",
    "required": "Required",
    "invalidcourse": "Invalid course",
    "youhavenotentredanycourses": (
        "You will be able to see recent courses listed here once you have accessed "
        "some of your enrolled courses."
    ),
    "privacy:metadata:block_course_recent": "Per-user settings of the Recent Courses block.",
    "privacy:metadata:block_course_recent:userid": "The ID of the user who owns these settings.",
    "privacy:metadata:block_course_recent:userlimit": "Maximum number of courses to display",
}


def get_string(key: str) -> str:
    try:
        return STRINGS[key]
    except KeyError:
        raise KeyError(f"Unknown string '{key}' in {COMPONENT}") from None
