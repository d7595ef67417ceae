# paige_api/services/todo_templates.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class TemplateTask(BaseModel):
    title: str
    note: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ChecklistTemplate(BaseModel):
    id: str
    name: str
    description: str
    tasks: List[TemplateTask]

    model_config = ConfigDict(frozen=True)


def _tasks(*pairs) -> List[TemplateTask]:
    return [TemplateTask(title=pair[0], note=pair[1] if len(pair) > 1 else None) for pair in pairs]


VENUE_SELECTION_TEMPLATE = ChecklistTemplate(
    id="venue-selection",
    name="Select Main Venue & Set Wedding Date",
    description="This is the first step to successful wedding prep!",
    tasks=_tasks(
        # Discover & Shortlist
        ("Browse and favorite venues on the Vendors page", "Favorite promising venues with <3 in the catalog to build your Shortlist. Visit the venue website, take notes and leave comments on the venue page!"),
        ("Set your venue budget cap on the Budget page", "Go to the Budget page and add a category for Venue expenses to start tracking how much you're willing to spend on your selected venue"),
        ("Confirm guest count", "Go to the Settings page and navigate to the Wedding Details tab to confirm your guest count"),
        ("Update your wedding vibe", "Go to Moodboards and add images, and vibes to come up with the vibes for your big day"),
        ("Pick 3–5 date windows that work for you",),
        ("Add must-haves", "e.g. do you have accessibility needs, do you need a Plan B room, do you need to bring in your own caterer, etc."),
        # Inquire
        ("Send availability + full-pricing requests to your Shortlist", "Use the Messages page to send inquiries to your shortlisted venues. Ask about availability for your date windows and request full pricing breakdowns including all fees, taxes, and required services"),
        ("Keep tabs of the responses on the Messages page", "Track all venue responses, pricing details, and availability in the Messages page. Compare responses side-by-side to make informed decisions"),
        # Tour
        ("Schedule tours in with the venues and add them to your calendar!", "Book tours for your top 3-5 venues. Schedule them close together if possible to compare while details are fresh"),
        ("Take notes on guest path, Plan B room, catering rules, power/AV", "During tours, document the guest flow, backup indoor spaces, catering restrictions, and technical requirements. Use the Notes feature in the Vendors page"),
        ("Snap photos and upload them to unique folders in the Files page", "Take photos of ceremony spaces, reception areas, bathrooms, parking, and any concerns. Organize by venue name in the Files page"),
        ('Calculate "true cost" in Compare → Venue Cost Calc', "Use the venue cost calculator to factor in all fees, required services, and hidden costs to get the real total price"),
        ("Check true capacity (with dance floor) and log sunset/photo window", "Verify actual capacity with dance floor and note the best lighting times for photos, especially for outdoor ceremonies"),
        ("Take note of hotel/airport travel time", "Consider guest convenience and transportation logistics when evaluating venue locations"),
        # Lock It In
        ("Select your winner in the Vendors page and choose your Main Venue", "Mark your chosen venue as the Main Venue in the Vendors page. This will be used for AI recommendations and other features"),
        ("Set your official Wedding Date", "This is crucial! Set your official wedding date in Settings → Wedding Details. This enables AI functionality and helps with timeline planning"),
        ("Request a written proposal and upload to Files", "Get a detailed written proposal from your chosen venue and upload it to the Files page for your records"),
        ("Review & e-sign in Contracts (payments, cancellation, overtime, Plan B trigger), then Mark as Signed", "Carefully review all contract terms including payment schedules, cancellation policies, overtime charges, and weather backup plans. Use the Contracts page to track and mark as signed"),
        ("Pay deposit and record it in Budget", "Make your venue deposit payment and record it in the Budget page under your Venue category to track your spending"),
    ),
)

FULL_WEDDING_TEMPLATE = ChecklistTemplate(
    id="full-wedding-planning",
    name="Full Wedding Checklist",
    description="Complete checklist from engagement to honeymoon",
    tasks=_tasks(
        # Kickoff (ASAP)
        ("Define budget, contributors, and decision style (who signs off on what)", "Go to Budget page to set your max budget and track contributions. Use Settings → Wedding Details to note decision-makers."),
        ("Sketch guest count range and vibe", "Update guest count in Settings → Wedding Details. Create mood boards in Moodboards page to define your vibe."),
        ("Choose 3–5 date windows", "Note your preferred date windows in Settings → Wedding Details for planning purposes."),
        ("Create a shared email/folder/spreadsheet for planning", "Set up your planning email in Settings → Account. Use Files page to organize all wedding documents."),
        ("List cultural/religious must-haves", "Add cultural requirements in Settings → Wedding Details. Use Notes in Vendors page to track venue policies."),
        # Lock Venue + Date
        ("Shortlist venues; request availability + full pricing; hold top dates", "Use Vendors page to favorite venues and send inquiries via Messages. Track responses and pricing in Messages page."),
        ("Tour spaces; inspect Plan B; verify policies", "Schedule tours via Messages page. Take photos during tours and upload to Files page organized by venue name."),
        ("Compare true cost; select venue; sign + pay deposit", "Use Compare → Venue Cost Calculator to factor all fees. Mark chosen venue as Main Venue in Vendors page."),
        ("Block hotel rooms", "Research hotels in Vendors page and book room blocks. Track booking details in Files page."),
        # Core Team (9–12 months)
        ("Book photographer, videographer, planner/coordinator (if using), entertainment, florist, officiant", "Use Vendors page to research and favorite vendors. Send inquiries via Messages and track responses."),
        ("Start registry (can be private)", "Research registry options and create accounts with your preferred retailers. Keep private until ready to share."),
        ("Launch simple wedding website", "Create wedding website in Settings → Wedding Details. Start with basic info and expand later."),
        ("Collect guest addresses", "Use Contacts page to build your guest list with addresses. Import from existing contacts or add manually."),
        # Looks + Attire (8–10 months)
        ("Shop outfits; schedule alterations", "Research bridal shops in Vendors page. Schedule fittings and track appointments in your personal calendar."),
        ("Pick wedding party; select their attire", "Add wedding party members in Contacts page. Research attire options in Vendors page."),
        ("Plan engagement shoot (optional)", "Book engagement shoot with your photographer via Messages page. Schedule in your personal calendar."),
        # Food + Flow (6–8 months)
        ("Taste menus/cake; decide bar approach", "Schedule tastings with caterers via Messages page. Track menu decisions in Files page."),
        ("Reserve rentals/lighting/photo booth if needed", "Research rental companies in Vendors page. Book via Messages and track in your personal calendar."),
        ("Outline ceremony + reception flow", "Create timeline and share with vendors via Messages for feedback."),
        ("Book transportation (party + guests if needed)", "Research transportation in Vendors page. Book via Messages and add to your personal calendar."),
        ("Plan honeymoon basics (passports, time off)", "Check passport requirements and book time off. Track honeymoon planning in Files page."),
        # Paper + Details (4–6 months)
        ("Order invitations + day-of stationery", "Research stationery vendors in Vendors page. Order via Messages and track delivery in your personal calendar."),
        ("Book hair/makeup; schedule trials", "Find hair/makeup artists in Vendors page. Book trials via Messages and schedule in your personal calendar."),
        ("Choose ceremony readings + music", "Select readings and music. Share choices with officiant via Messages page."),
        ("Design décor plan and timeline with your florist/venue", "Collaborate with florist via Messages. Upload inspiration images to Files page."),
        # Send + Finalize (2–4 months)
        ("Mail invitations (set RSVP ~3–4 weeks before)", "Mail invitations and track RSVPs in Contacts page. Set RSVP deadline in your personal calendar."),
        ("Track RSVPs and meal preferences", "Update guest responses in Contacts page. Track meal preferences for caterer."),
        ("Order rings + accessories", "Research jewelers in Vendors page. Order via Messages and track delivery in your personal calendar."),
        ("Confirm officiant script + license requirements", "Finalize ceremony script with officiant via Messages. Check license requirements in Files."),
        ("Reserve rehearsal-dinner space + after-party spot", "Book venues in Vendors page. Reserve via Messages and add to your personal calendar."),
        # Tighten Up (4–6 weeks)
        ("Build seating chart; confirm headcount with caterer", "Create seating chart in Contacts page. Confirm final headcount with caterer via Messages."),
        ("Share day-of timeline + contacts with vendors and wedding party", "Share timeline via Messages with all vendors. Include contact list for wedding day."),
        ("Approve floor plan; confirm load-in/out and power/AV", "Review floor plan with venue via Messages. Confirm technical requirements and timing."),
        ("Book final fittings; break in shoes", "Schedule final fittings in your personal calendar. Break in shoes and track in Files page."),
        ("Prepare vendor meal list + allergies", "Create vendor meal list in Files page. Include dietary restrictions and allergies."),
        # Week Of
        ("Walk the venue; verify Plan B and signage placement", "Schedule final walk-through via Messages. Verify backup plans and signage locations."),
        ("Pack emergency kit (tape, steamer, meds, sewing kit, stain stick, chargers)", "Create emergency kit checklist in Files page. Pack and organize by category."),
        ("Assemble tip envelopes + final payments; assign who hands them out", "Prepare tip envelopes in Files page. Assign distribution to trusted wedding party members."),
        ("Organize décor/welcome bags; label boxes by area", "Organize décor by venue area in Files page. Label boxes clearly for setup team."),
        ("Print extra timelines, shot list, and seating", "Print backup copies of all documents. Store in Files page for easy access."),
        # Day Before
        ("Rehearse ceremony; confirm lineup and timing", "Run through ceremony with officiant and wedding party. Confirm timing and positioning."),
        ("Stage flat-lay items (invites, rings, keepsakes)", "Set up flat-lay items for photographer. Include invitation suite, rings, and special keepsakes."),
        ("Hydrate, eat, sleep", "Take care of yourself! Get plenty of rest and stay hydrated for the big day."),
        # Wedding Day
        ("Start hair/makeup on schedule; buffer 15 mins before lineup", "Follow your timeline. Build in buffer time for any delays."),
        ("Hand off rings, vows, license, and emergency kit to point people", "Assign trusted people to handle important items. Use your emergency kit from Files page."),
        ("Sneak a plate + water during cocktail hour", "Make sure to eat and stay hydrated! Delegate someone to bring you food and water."),
        ("Enjoy the moments and delegate everything else", "Focus on enjoying your day. Let your wedding party and vendors handle the details."),
        # After
        ("Return rentals; tip/settle final invoices", "Return all rentals and settle final vendor payments. Track in Files page for records."),
        ("Send thank-yous; review vendors online", "Send thank-you notes to vendors via Messages. Leave reviews to help other couples."),
        ("Preserve attire; back up photos/videos", "Get attire professionally cleaned and preserved. Back up all photos and videos in Files page."),
        ("Handle name changes (if applicable)", "Start name change process if desired. Track required documents in Files page."),
        # Don't-forget wins
        ("Confirm accessibility, shade/heat, and quiet space", "Verify venue accessibility and comfort options. Check with venue via Messages page."),
        ("Set rain/heat trigger time and who decides", "Establish weather backup plan with venue. Document decision-makers in Files page."),
        ("Arrange kids' plan (meals, activities, sitter)", "Plan activities and meals for children. Coordinate with venue and parents via Messages."),
        ("Map local events that impact traffic/hotels", "Check for local events that might affect traffic or hotel availability. Share with guests."),
        ("Print 10–15% extra stationery for mistakes/keepsakes", "Order extra stationery for mistakes and keepsakes. Track quantities in Files page."),
    ),
)

TEMPLATES = {template.id: template for template in (VENUE_SELECTION_TEMPLATE, FULL_WEDDING_TEMPLATE)}


def select_template(has_wedding_date: bool) -> ChecklistTemplate:
    return FULL_WEDDING_TEMPLATE if has_wedding_date else VENUE_SELECTION_TEMPLATE
