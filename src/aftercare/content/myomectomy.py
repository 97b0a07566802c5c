"""Static content of the myomectomy aftercare brochure.

Section -> content block -> checklist item. Items are (id, text) pairs;
every item starts out not completed and without notes. Item ids are
unique within a section, and progress rows refer to them by
(section id, item id).
"""

BROCHURE_ID = "myomectomy"
BROCHURE_TITLE = "Abdominal Myomectomy Recovery Guide"

MYOMECTOMY_SECTIONS = [
    {
        "id": "activity-restrictions",
        "title": "Activity Restrictions",
        "content": [
            {
                "id": "immediate-post-op",
                "title": "Immediate Post-Operative Period (First 24-48 hours)",
                "items": [
                    ("rest-in-bed", "Rest in bed as much as possible"),
                    ("avoid-sitting", "Avoid sitting for long periods"),
                    ("no-driving", "Do not drive for at least 24 hours"),
                ],
            },
            {
                "id": "first-week",
                "title": "First Week After Surgery",
                "items": [
                    ("no-heavy-lifting", "No heavy lifting (more than 10 pounds)"),
                    ("no-strenuous-exercise", "No strenuous exercise or activities"),
                    ("walk-gently", "Walk gently around the house"),
                    ("avoid-bending", "Avoid bending, twisting, or sudden movements"),
                ],
            },
            {
                "id": "second-week",
                "title": "Second Week and Beyond",
                "items": [
                    ("gradual-activity", "Gradually increase activity as tolerated"),
                    ("listen-to-body", "Listen to your body - stop if you feel pain"),
                    ("avoid-sex", "Avoid sexual intercourse for 6 weeks"),
                    ("no-tampons", "No tampons for 6 weeks"),
                ],
            },
        ],
    },
    {
        "id": "pain-management",
        "title": "Pain Management",
        "content": [
            {
                "id": "medication",
                "title": "Medication",
                "items": [
                    ("take-prescribed", "Take prescribed pain medication as directed"),
                    ("acetaminophen", "Acetaminophen (Tylenol) for mild pain"),
                    ("ibuprofen", "Ibuprofen (Advil) for inflammation and pain"),
                    ("avoid-aspirin", "Avoid aspirin unless specifically prescribed"),
                ],
            },
            {
                "id": "non-medication",
                "title": "Non-Medication Pain Relief",
                "items": [
                    ("ice-packs", "Apply ice packs to incision area for 20 minutes"),
                    ("heat-packs", "Use heat packs for muscle soreness"),
                    ("rest", "Get adequate rest and sleep"),
                    ("comfortable-position", "Find comfortable positions for sleeping"),
                ],
            },
        ],
    },
    {
        "id": "warning-signs",
        "title": "Warning Signs/Symptoms",
        "content": [
            {
                "id": "immediate-concerns",
                "title": "Contact Your Doctor Immediately If You Experience:",
                "items": [
                    ("fever-over-101", "Fever over 101°F (38.3°C)"),
                    ("severe-pain", "Severe pain not relieved by medication"),
                    ("heavy-bleeding", "Heavy vaginal bleeding (soaking a pad in 1 hour)"),
                    ("foul-discharge", "Foul-smelling vaginal discharge"),
                    ("incision-problems", "Redness, swelling, or drainage from incision"),
                    ("chest-pain", "Chest pain or difficulty breathing"),
                    ("leg-pain", "Pain, redness, or swelling in legs"),
                ],
            },
        ],
    },
    {
        "id": "follow-up-schedule",
        "title": "Follow-up Schedule",
        "content": [
            {
                "id": "post-op-visits",
                "title": "Post-Operative Visits",
                "items": [
                    ("2-week-visit", "2-week post-operative visit"),
                    ("6-week-visit", "6-week post-operative visit"),
                    ("annual-checkup", "Annual gynecological checkup"),
                ],
            },
            {
                "id": "contact-info",
                "title": "Contact Information",
                "items": [
                    ("emergency-number", "Emergency contact number: [Your doctor's number]"),
                    ("office-hours", "Office hours: [Your doctor's office hours]"),
                ],
            },
        ],
    },
    {
        "id": "healing-timeline",
        "title": "General Healing Timeline",
        "content": [
            {
                "id": "week-1-2",
                "title": "Weeks 1-2: Initial Recovery",
                "items": [
                    ("incision-healing", "Incision healing begins"),
                    ("pain-decreases", "Pain gradually decreases"),
                    ("energy-low", "Energy levels may be low"),
                ],
            },
            {
                "id": "week-3-4",
                "title": "Weeks 3-4: Gradual Improvement",
                "items": [
                    ("more-energy", "Energy levels improve"),
                    ("less-pain", "Significant pain reduction"),
                    ("light-activities", "Can resume light activities"),
                ],
            },
            {
                "id": "week-5-6",
                "title": "Weeks 5-6: Near Full Recovery",
                "items": [
                    ("normal-activities", "Can resume most normal activities"),
                    ("exercise-resume", "Can resume exercise (with doctor approval)"),
                    ("work-return", "Can return to work (if approved by doctor)"),
                ],
            },
        ],
    },
    {
        "id": "incision-care",
        "title": "Incision Care",
        "content": [
            {
                "id": "daily-care",
                "title": "Daily Care",
                "items": [
                    ("keep-clean", "Keep incision clean and dry"),
                    ("gentle-washing", "Gently wash with mild soap and water"),
                    ("pat-dry", "Pat dry with clean towel"),
                    ("no-scrubbing", "Do not scrub or rub the incision"),
                ],
            },
            {
                "id": "dressings",
                "title": "Dressings",
                "items": [
                    ("change-dressings", "Change dressings as instructed by your doctor"),
                    ("watch-for-signs", "Watch for signs of infection"),
                    ("no-tight-clothing", "Avoid tight clothing over incision"),
                ],
            },
        ],
    },
    {
        "id": "diet-medications",
        "title": "Diet & Medications",
        "content": [
            {
                "id": "diet-guidelines",
                "title": "Diet Guidelines",
                "items": [
                    ("stay-hydrated", "Stay well hydrated"),
                    ("high-fiber", "Eat high-fiber foods to prevent constipation"),
                    ("small-meals", "Eat small, frequent meals"),
                    ("avoid-gas", "Avoid foods that cause gas"),
                ],
            },
            {
                "id": "medication-guidelines",
                "title": "Medication Guidelines",
                "items": [
                    ("take-as-prescribed", "Take all medications as prescribed"),
                    ("finish-antibiotics", "Finish all antibiotics if prescribed"),
                    ("no-new-meds", "Do not start new medications without doctor approval"),
                    ("report-side-effects", "Report any side effects to your doctor"),
                ],
            },
        ],
    },
]
