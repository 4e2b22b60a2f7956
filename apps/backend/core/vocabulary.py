"""
Fixed vocabulary tables for the synthetic job dataset.

Order matters: the generator indexes these tuples with stream values, so
reordering or extending a table changes every generated dataset.
"""

COMPANIES = (
    "Orbit Labs",
    "Pinecone Systems",
    "Northwind Analytics",
    "Bluefin Robotics",
    "Cedar Health",
    "Lumen Financial",
    "Harbor Logistics",
    "Quartz Security",
    "Maple Learning",
    "Summit Energy",
    "Nimbus Cloud",
    "Redwood Media",
    "Atlas Biotech",
    "Coral Payments",
    "Ironclad Games",
    "Sparrow Mobility",
    "Willow Retail",
    "Vertex AI",
    "Granite Insurance",
    "Beacon Civic Tech",
)

TITLES = (
    "Software Engineer",
    "Frontend Developer",
    "Backend Engineer",
    "Full Stack Developer",
    "Data Analyst",
    "Data Scientist",
    "Machine Learning Engineer",
    "DevOps Engineer",
    "Site Reliability Engineer",
    "Product Designer",
    "Product Manager",
    "QA Engineer",
    "Mobile Developer",
    "Security Analyst",
    "Cloud Engineer",
)

LEVELS = (
    "Intern",
    "Junior",
    "Associate",
    "Mid",
    "Senior",
    "Staff",
)

JOB_TYPES = (
    "Internship",
    "Full-time",
    "Part-time",
    "Contract",
)

CITIES = (
    "San Diego, CA",
    "San Francisco, CA",
    "Los Angeles, CA",
    "Seattle, WA",
    "Austin, TX",
    "Denver, CO",
    "Chicago, IL",
    "Boston, MA",
    "New York, NY",
    "Atlanta, GA",
    "Miami, FL",
    "Portland, OR",
)

WORK_MODES = (
    "On-site",
    "Hybrid",
    "Remote",
)

SKILLS = (
    "Python",
    "JavaScript",
    "TypeScript",
    "React",
    "Node.js",
    "SQL",
    "PostgreSQL",
    "AWS",
    "Docker",
    "Kubernetes",
    "Go",
    "Java",
    "Figma",
    "Terraform",
    "GraphQL",
    "Pandas",
    "PyTorch",
    "Git",
)

VERDICTS = ("certified", "pending", "rejected")
