from __future__ import annotations

MOCK_JOBS: list[dict[str, object]] = [
    {
        "id": "1",
        "title": "Frontend Developer",
        "company": "TechCorp Inc.",
        "location": "San Francisco, CA",
        "salary": "$80k - $120k",
        "type": "Full-time",
        "match_percentage": 95,
        "reason": (
            "Perfect match for your React and JavaScript skills. "
            "Your portfolio demonstrates strong frontend expertise."
        ),
        "required_skills": ["React", "JavaScript", "TypeScript", "CSS", "HTML"],
        "description": (
            "We're looking for a passionate Frontend Developer to join our team and build amazing "
            "user experiences. You'll work with React, TypeScript, and modern web technologies."
        ),
        "posted": "2 days ago",
    },
    {
        "id": "2",
        "title": "Full Stack Engineer",
        "company": "StartupXYZ",
        "location": "Remote",
        "salary": "$90k - $140k",
        "type": "Full-time",
        "match_percentage": 88,
        "reason": "Your diverse skill set in both frontend and backend makes you ideal for this full-stack role.",
        "required_skills": ["React", "Node.js", "Python", "MongoDB", "AWS"],
        "description": (
            "Join our fast-growing startup as a Full Stack Engineer. "
            "Build scalable applications from frontend to backend."
        ),
        "posted": "1 week ago",
    },
    {
        "id": "3",
        "title": "UI/UX Designer",
        "company": "Design Studio",
        "location": "New York, NY",
        "salary": "$70k - $100k",
        "type": "Full-time",
        "match_percentage": 72,
        "reason": (
            "Your design interests and creative background align well with this role, "
            "though some design tool experience would be beneficial."
        ),
        "required_skills": ["Figma", "Sketch", "Adobe Creative Suite", "Prototyping", "User Research"],
        "description": (
            "Create beautiful and intuitive user experiences for our clients. "
            "Work on diverse projects from mobile apps to web platforms."
        ),
        "posted": "3 days ago",
    },
    {
        "id": "4",
        "title": "Data Scientist",
        "company": "AI Innovations",
        "location": "Austin, TX",
        "salary": "$100k - $160k",
        "type": "Full-time",
        "match_percentage": 65,
        "reason": (
            "Your programming skills provide a good foundation, but you'd need to develop "
            "expertise in data science and machine learning."
        ),
        "required_skills": ["Python", "Machine Learning", "SQL", "Statistics", "TensorFlow"],
        "description": (
            "Analyze complex datasets and build machine learning models to drive business "
            "insights and decisions."
        ),
        "posted": "5 days ago",
    },
]

LEARNING_COURSES: list[dict[str, object]] = [
    {
        "id": "1",
        "title": "Advanced React Development",
        "provider": "Tech Academy",
        "duration": "8 weeks",
        "difficulty": "Intermediate",
        "rating": 4.8,
        "students": "12,450",
        "price": "Free",
        "description": "Master advanced React concepts including hooks, context, and performance optimization.",
        "skills": ["React Hooks", "State Management", "Performance", "Testing"],
        "progress": 0,
        "is_recommended": True,
    },
    {
        "id": "2",
        "title": "Full Stack Web Development Bootcamp",
        "provider": "CodeCamp Pro",
        "duration": "12 weeks",
        "difficulty": "Beginner to Advanced",
        "rating": 4.9,
        "students": "28,340",
        "price": "$99",
        "description": "Complete full-stack development course covering frontend, backend, and deployment.",
        "skills": ["Node.js", "Express", "MongoDB", "React", "AWS"],
        "progress": 0,
        "is_recommended": True,
    },
    {
        "id": "3",
        "title": "UI/UX Design Fundamentals",
        "provider": "Design Institute",
        "duration": "6 weeks",
        "difficulty": "Beginner",
        "rating": 4.6,
        "students": "9,120",
        "price": "$79",
        "description": "Learn the principles of user interface and user experience design.",
        "skills": ["Figma", "Design Thinking", "Prototyping", "User Research"],
        "progress": 0,
        "is_recommended": False,
    },
    {
        "id": "4",
        "title": "Data Science with Python",
        "provider": "Data University",
        "duration": "10 weeks",
        "difficulty": "Intermediate",
        "rating": 4.7,
        "students": "15,780",
        "price": "$149",
        "description": "Comprehensive data science course covering machine learning and data analysis.",
        "skills": ["Python", "Pandas", "Machine Learning", "Statistics"],
        "progress": 0,
        "is_recommended": False,
    },
]

SKILL_GAPS: list[dict[str, object]] = [
    {"skill": "TypeScript", "current_level": 60, "target_level": 90, "priority": "High", "courses": 3},
    {"skill": "Node.js", "current_level": 30, "target_level": 80, "priority": "Medium", "courses": 5},
    {"skill": "AWS", "current_level": 20, "target_level": 70, "priority": "Medium", "courses": 4},
    {"skill": "Testing", "current_level": 40, "target_level": 85, "priority": "High", "courses": 2},
]
