"""
직업별 스킬 템플릿 정적 테이블.

딕셔너리 선언 순서가 곧 부분 일치 탐색 순서이므로 키 순서를 임의로 바꾸지 않는다.
"""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from skillquest.learning_core.domain.learning_enums import SkillCategory, SkillLevel
from skillquest.learning_core.domain.skill_template import SkillTemplate

B = SkillLevel.BEGINNER
I = SkillLevel.INTERMEDIATE
A = SkillLevel.ADVANCED

TECH = SkillCategory.TECHNICAL
SOFT = SkillCategory.SOFT
DOMAIN = SkillCategory.DOMAIN
TOOL = SkillCategory.TOOL


def _template(
    name: str,
    description: str,
    level: SkillLevel,
    category: SkillCategory,
    importance: int,
    estimated_time: str,
    prerequisites: Sequence[str] = (),
) -> SkillTemplate:
    return SkillTemplate(
        name=name,
        description=description,
        level=level,
        category=category,
        importance=importance,
        estimated_time_to_learn=estimated_time,
        prerequisites=tuple(prerequisites),
    )


PROFESSION_SKILL_TEMPLATES: Dict[str, Tuple[SkillTemplate, ...]] = {
    "web developer": (
        _template("HTML Fundamentals", "Learn the basics of HTML, including document structure, elements, attributes, and semantic markup.", B, TECH, 10, "2 weeks"),
        _template("CSS Styling", "Master CSS for styling web pages, including selectors, properties, layouts, and responsive design.", B, TECH, 9, "4 weeks", ["HTML Fundamentals"]),
        _template("JavaScript Basics", "Learn JavaScript fundamentals including variables, data types, functions, and control flow.", B, TECH, 9, "6 weeks", ["HTML Fundamentals", "CSS Styling"]),
        _template("DOM Manipulation", "Learn to interact with and modify the Document Object Model using JavaScript.", I, TECH, 8, "3 weeks", ["JavaScript Basics"]),
        _template("Responsive Web Design", "Create websites that work across different screen sizes and devices using media queries and flexible layouts.", I, TECH, 8, "3 weeks", ["CSS Styling"]),
        _template("CSS Frameworks", "Learn popular CSS frameworks like Bootstrap or Tailwind CSS to streamline development.", I, TOOL, 7, "2 weeks", ["CSS Styling", "Responsive Web Design"]),
        _template("JavaScript ES6+", "Master modern JavaScript features like arrow functions, destructuring, modules, and promises.", I, TECH, 8, "4 weeks", ["JavaScript Basics"]),
        _template("Git Version Control", "Learn to use Git for tracking changes, collaborating, and managing code versions.", B, TOOL, 8, "2 weeks"),
        _template("React Fundamentals", "Learn the basics of React, including components, props, state, and lifecycle methods.", I, TECH, 8, "6 weeks", ["JavaScript ES6+", "DOM Manipulation"]),
        _template("API Integration", "Learn to interact with APIs, fetch data, and handle responses in web applications.", I, TECH, 7, "3 weeks", ["JavaScript ES6+"]),
        _template("Web Accessibility", "Learn principles and techniques for creating accessible websites for users with disabilities.", I, TECH, 7, "2 weeks", ["HTML Fundamentals", "CSS Styling"]),
        _template("Testing Web Applications", "Learn testing methodologies and frameworks for ensuring quality web applications.", A, TECH, 6, "4 weeks", ["React Fundamentals"]),
        _template("Web Performance Optimization", "Techniques for improving website speed, load times, and overall performance.", A, TECH, 7, "3 weeks", ["JavaScript ES6+", "CSS Styling"]),
    ),
    "data scientist": (
        _template("Python Programming", "Learn Python programming fundamentals, a must-have language for data science.", B, TECH, 10, "6 weeks"),
        _template("Mathematics for Data Science", "Understand the essential mathematical concepts including statistics, linear algebra, and calculus.", B, DOMAIN, 9, "8 weeks"),
        _template("Data Cleaning and Preprocessing", "Learn techniques for handling missing data, outliers, and preparing datasets for analysis.", B, TECH, 9, "4 weeks", ["Python Programming"]),
        _template("Exploratory Data Analysis", "Master techniques for initial data investigations to discover patterns and anomalies.", I, TECH, 8, "5 weeks", ["Data Cleaning and Preprocessing", "Mathematics for Data Science"]),
        _template("Data Visualization", "Learn to create effective visual representations of data using libraries like Matplotlib and Seaborn.", I, TECH, 8, "4 weeks", ["Python Programming", "Exploratory Data Analysis"]),
        _template("Machine Learning Fundamentals", "Understand core ML concepts, algorithms, and the machine learning workflow.", I, TECH, 9, "8 weeks", ["Mathematics for Data Science", "Data Cleaning and Preprocessing"]),
        _template("SQL for Data Science", "Learn SQL for data extraction, manipulation, and analysis from databases.", B, TECH, 7, "4 weeks"),
        _template("Deep Learning Basics", "Introduction to neural networks, deep learning frameworks, and applications.", A, TECH, 7, "8 weeks", ["Machine Learning Fundamentals"]),
        _template("Natural Language Processing", "Learn techniques for processing and analyzing text data using machine learning.", A, TECH, 6, "6 weeks", ["Machine Learning Fundamentals", "Deep Learning Basics"]),
        _template("Big Data Technologies", "Introduction to tools and frameworks for processing large-scale datasets.", A, TOOL, 6, "6 weeks", ["Python Programming", "SQL for Data Science"]),
        _template("Data Science Project Management", "Learn to plan, execute, and deliver data science projects effectively.", I, SOFT, 7, "3 weeks", ["Exploratory Data Analysis", "Machine Learning Fundamentals"]),
        _template("Ethics in Data Science", "Understand ethical considerations, biases, and responsible AI practices.", I, DOMAIN, 8, "2 weeks", ["Machine Learning Fundamentals"]),
    ),
    "digital marketer": (
        _template("Marketing Fundamentals", "Understand core marketing principles, customer behavior, and marketing strategies.", B, DOMAIN, 10, "4 weeks"),
        _template("Content Marketing", "Learn to create valuable content that attracts and engages target audiences.", B, TECH, 9, "5 weeks"),
        _template("Social Media Marketing", "Master strategies for effective marketing across different social media platforms.", B, TECH, 9, "5 weeks", ["Marketing Fundamentals"]),
        _template("SEO Fundamentals", "Learn search engine optimization techniques to improve website visibility in search results.", B, TECH, 8, "6 weeks"),
        _template("Email Marketing", "Learn to create effective email campaigns, automation, and list management.", I, TECH, 7, "3 weeks", ["Content Marketing"]),
        _template("Digital Analytics", "Learn to measure, analyze, and report on marketing performance using tools like Google Analytics.", I, TECH, 8, "6 weeks", ["Marketing Fundamentals"]),
        _template("Paid Advertising", "Master paid advertising strategies across platforms like Google Ads and social media.", I, TECH, 8, "6 weeks", ["Marketing Fundamentals", "Digital Analytics"]),
        _template("Conversion Rate Optimization", "Learn techniques to improve website and landing page conversion rates.", A, TECH, 7, "4 weeks", ["Digital Analytics", "SEO Fundamentals"]),
        _template("Marketing Automation", "Master tools and strategies for automating marketing workflows and processes.", A, TOOL, 7, "5 weeks", ["Email Marketing", "Digital Analytics"]),
        _template("Video Marketing", "Learn to create and optimize video content for marketing purposes.", I, TECH, 7, "4 weeks", ["Content Marketing"]),
        _template("Influencer Marketing", "Understand how to work with influencers to promote brands and products.", I, TECH, 6, "3 weeks", ["Social Media Marketing"]),
        _template("Marketing Strategy", "Learn to develop comprehensive digital marketing strategies aligned with business goals.", A, DOMAIN, 9, "6 weeks", ["Marketing Fundamentals", "Digital Analytics", "Paid Advertising"]),
    ),
    "graphic designer": (
        _template("Design Principles", "Understand core design principles including color theory, typography, composition, and visual hierarchy.", B, DOMAIN, 10, "5 weeks"),
        _template("Adobe Photoshop", "Learn to use Photoshop for image editing, manipulation, and digital compositions.", B, TOOL, 9, "6 weeks"),
        _template("Adobe Illustrator", "Master vector graphics creation and editing for logos, illustrations, and typography.", B, TOOL, 9, "6 weeks"),
        _template("Typography", "Learn the art and technique of arranging type for effective communication.", I, TECH, 8, "4 weeks", ["Design Principles"]),
        _template("Logo Design", "Learn to create memorable, distinctive logos that effectively represent brands.", I, TECH, 8, "5 weeks", ["Adobe Illustrator", "Design Principles"]),
        _template("UI/UX Design Basics", "Understand the fundamentals of designing user interfaces and experiences.", I, TECH, 7, "6 weeks", ["Design Principles"]),
        _template("Adobe InDesign", "Learn to create print layouts, publications, and multi-page documents.", I, TOOL, 7, "5 weeks", ["Typography"]),
        _template("Print Design", "Master techniques for creating effective designs for physical print media.", I, TECH, 6, "4 weeks", ["Adobe InDesign", "Adobe Illustrator"]),
        _template("Digital Illustration", "Develop skills for creating original illustrations and artwork.", A, TECH, 7, "8 weeks", ["Adobe Illustrator", "Adobe Photoshop"]),
        _template("Motion Graphics", "Learn to create animated graphics and visual effects for digital media.", A, TECH, 6, "8 weeks", ["Adobe Photoshop", "Adobe Illustrator"]),
        _template("Brand Identity Design", "Learn to develop comprehensive visual branding systems for organizations.", A, TECH, 8, "6 weeks", ["Logo Design", "Typography"]),
        _template("Design Portfolio Development", "Learn to curate and present your design work effectively to potential clients or employers.", I, SOFT, 9, "3 weeks", ["Design Principles"]),
    ),
    "machine learning engineer": (
        _template("Deep Learning", "Master neural networks and deep learning frameworks.", A, TECH, 10, "12 weeks"),
        _template("MLOps", "Learn to deploy and maintain ML models in production.", A, TECH, 9, "8 weeks"),
    ),
    "devops engineer": (
        _template("Linux Administration", "Master Linux system administration and shell scripting.", B, TECH, 9, "6 weeks"),
        _template("Docker", "Learn containerization with Docker and container orchestration.", I, TECH, 9, "4 weeks"),
        _template("Kubernetes", "Master container orchestration with Kubernetes.", A, TECH, 8, "8 weeks", ["Docker"]),
    ),
    "cloud engineer": (
        _template("AWS Fundamentals", "Learn core AWS services and cloud concepts.", B, TECH, 10, "6 weeks"),
        _template("Infrastructure as Code", "Master tools like Terraform for infrastructure automation.", I, TECH, 9, "6 weeks"),
    ),
    "cybersecurity analyst": (
        _template("Network Security", "Learn network protocols and security fundamentals.", B, TECH, 10, "8 weeks"),
        _template("Security Tools", "Master common security tools and penetration testing.", I, TECH, 9, "6 weeks"),
    ),
    "game developer": (
        _template("Unity Fundamentals", "Learn Unity game engine basics and C# programming.", B, TECH, 10, "8 weeks"),
        _template("Game Design", "Master principles of game design and mechanics.", I, DOMAIN, 8, "6 weeks"),
    ),
    "blockchain developer": (
        _template("Blockchain Fundamentals", "Understand blockchain technology and cryptography basics.", B, DOMAIN, 10, "6 weeks"),
        _template("Smart Contracts", "Learn Solidity and smart contract development.", I, TECH, 9, "8 weeks"),
    ),
    "ui/ux designer": (
        _template("Design Principles", "Master fundamental principles of visual design.", B, DOMAIN, 10, "6 weeks"),
        _template("Figma", "Learn to create and prototype designs in Figma.", B, TOOL, 9, "4 weeks"),
        _template("User Research", "Master user research methods and usability testing.", I, DOMAIN, 8, "6 weeks"),
    ),
    "product manager": (
        _template("Product Strategy", "Learn product strategy and roadmap planning.", I, DOMAIN, 10, "6 weeks"),
        _template("Agile Management", "Master Agile methodologies and team leadership.", I, DOMAIN, 9, "4 weeks"),
    ),
    "digital marketing specialist": (
        _template("SEO Fundamentals", "Learn search engine optimization techniques.", B, TECH, 9, "6 weeks"),
        _template("Social Media Marketing", "Master social media strategy and content creation.", B, TECH, 9, "4 weeks"),
        _template("Google Analytics", "Learn to analyze and report on marketing metrics.", I, TOOL, 8, "4 weeks"),
    ),
    "content creator": (
        _template("Video Production", "Learn video filming and editing techniques.", B, TECH, 10, "8 weeks"),
        _template("Content Strategy", "Master content planning and audience engagement.", I, DOMAIN, 9, "4 weeks"),
    ),
    "business analyst": (
        _template("Business Analysis", "Learn requirements gathering and analysis techniques.", B, DOMAIN, 10, "6 weeks"),
        _template("SQL", "Master database querying and data analysis.", I, TECH, 8, "6 weeks"),
        _template("Data Visualization", "Learn to create effective data visualizations.", I, TECH, 8, "4 weeks", ["SQL"]),
    ),
}

GENERIC_SKILL_TEMPLATES: Tuple[SkillTemplate, ...] = (
    _template("Time Management", "Learn effective techniques for managing your time, setting priorities, and improving productivity.", B, SOFT, 9, "3 weeks"),
    _template("Communication Skills", "Develop clear and effective verbal and written communication for professional success.", B, SOFT, 10, "4 weeks"),
    _template("Project Management", "Learn fundamentals of planning, executing, and completing projects efficiently.", I, SOFT, 8, "5 weeks"),
    _template("Problem Solving", "Develop analytical thinking and creative problem-solving techniques.", I, SOFT, 9, "4 weeks"),
    _template("Digital Literacy", "Build essential skills for working with digital tools, software, and online platforms.", B, TECH, 8, "4 weeks"),
    _template("Networking", "Learn strategies for building and maintaining professional relationships and connections.", I, SOFT, 7, "3 weeks"),
    _template("Critical Thinking", "Develop skills to analyze information, evaluate evidence, and make reasoned judgments.", I, SOFT, 8, "5 weeks"),
    _template("Presentation Skills", "Learn to create and deliver effective presentations for various audiences.", I, SOFT, 7, "4 weeks", ["Communication Skills"]),
    _template("Emotional Intelligence", "Develop awareness and understanding of emotions in yourself and others for better interactions.", A, SOFT, 8, "6 weeks"),
    _template("Leadership", "Learn skills for leading teams, making decisions, and inspiring others.", A, SOFT, 7, "8 weeks", ["Communication Skills", "Emotional Intelligence"]),
)
