"""Static lookup tables used by the extraction engine.

These are plain data, not behavior: add or remove entries freely. Order
matters in two places:

* ``KNOWN_CITIES`` is scanned front to back and the first city found anywhere
  in the text wins, so earlier entries take precedence over later ones even
  if a later city appears earlier in the document.
* ``SKILL_CATALOGUE`` order decides the order catalogue hits are reported in.

Skill entries shorter than 3 characters are never reported, so "Go" or "C#"
belong here only in a longer spelling.
"""

KNOWN_CITIES: tuple[str, ...] = (
    "Mumbai", "Delhi", "Bangalore", "Bengaluru", "Hyderabad", "Chennai",
    "Kolkata", "Pune", "Ahmedabad", "Surat", "Jaipur", "Lucknow", "Kanpur",
    "Nagpur", "Indore", "Thane", "Bhopal", "Visakhapatnam", "Vijayawada",
    "Pimpri", "Patna", "Vadodara", "Ghaziabad", "Ludhiana", "Agra", "Nashik",
    "Faridabad", "Meerut", "Rajkot", "Varanasi", "Srinagar", "Aurangabad",
    "Dhanbad", "Amritsar", "Allahabad", "Ranchi", "Howrah", "Coimbatore",
    "Jabalpur", "Gwalior", "Jodhpur", "Madurai", "Raipur", "Kota", "Guwahati",
    "Chandigarh", "Thiruvananthapuram", "Solapur", "Tiruchirappalli",
    "Tiruppur", "Moradabad", "Mysore", "Bareilly", "Gurgaon", "Aligarh",
    "Jalandhar", "Bhubaneswar", "Salem", "Warangal", "Guntur", "Bhiwandi",
    "Saharanpur", "Gorakhpur", "Bikaner", "Amravati", "Noida", "Jamshedpur",
    "Bhilai", "Cuttack", "Firozabad", "Kochi", "Nellore", "Bhavnagar",
    "Dehradun", "Durgapur", "Rajahmundry", "Tirupati", "Kadapa", "Kakinada",
    "Suryapet", "Panruti", "Gudivada", "Kodad", "Eluru", "Salur", "Adoni",
    "Nirmal", "Khammam", "Anantapur", "Karimnagar",
)

SKILL_CATALOGUE: tuple[str, ...] = (
    # Languages
    "JavaScript", "TypeScript", "Python", "Java", "C++", "Ruby", "PHP",
    "Swift", "Kotlin", "Golang", "Rust", "Scala", "MATLAB",
    # Frontend / backend frameworks
    "React", "React.js", "Angular", "Vue", "Vue.js", "Node.js", "Express",
    "Next.js", "Nuxt.js", "Django", "Flask", "FastAPI", "Spring",
    "Spring Boot", "Laravel", "ASP.NET", ".NET Core",
    "HTML", "HTML5", "CSS", "CSS3", "SASS", "SCSS", "LESS", "Tailwind",
    "Bootstrap", "Material UI",
    # Data stores
    "MongoDB", "MySQL", "PostgreSQL", "Redis", "Oracle", "SQL Server",
    "SQLite", "DynamoDB", "Cassandra",
    # Cloud / ops
    "AWS", "Azure", "GCP", "Google Cloud", "Docker", "Kubernetes", "Jenkins",
    "CI/CD", "DevOps", "Git", "GitHub", "GitLab", "Bitbucket", "SVN",
    # Process
    "Agile", "Scrum", "Kanban", "Jira", "Confluence",
    # Data / ML
    "Machine Learning", "Deep Learning", "Artificial Intelligence",
    "Data Science", "NLP", "Computer Vision", "TensorFlow", "PyTorch",
    "Keras", "scikit-learn", "Pandas", "NumPy",
    # APIs and architecture
    "REST API", "RESTful", "GraphQL", "Microservices", "SOA",
    "Cloud Computing",
    # Systems
    "Linux", "Unix", "Windows Server", "Shell Scripting", "Bash",
    "PowerShell",
    # Testing and tooling
    "Testing", "Unit Testing", "Jest", "Mocha", "Selenium", "Cypress",
    "JUnit", "Webpack", "Babel", "Vite", "npm", "yarn", "pnpm",
)
