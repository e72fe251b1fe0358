from .user import User
from .project import Project
from .testimonial import Testimonial
