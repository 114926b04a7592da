"""
Common short names for schools, mapped to their canonical directory names.

Keys are lower-case as they appear in posts; values are the names used by
the ``schools`` table (IPEDS spelling). The end-of-run report lists the most
frequent names nothing resolved; this table is where they get added.
"""

SCHOOL_ABBREVIATIONS = {
    # Ivy League
    "harvard": "Harvard University",
    "yale": "Yale University",
    "princeton": "Princeton University",
    "columbia": "Columbia University in the City of New York",
    "columbia university": "Columbia University in the City of New York",
    "cu": "Columbia University in the City of New York",
    "penn": "University of Pennsylvania",
    "upenn": "University of Pennsylvania",
    "wharton": "University of Pennsylvania",
    "brown": "Brown University",
    "dartmouth": "Dartmouth College",
    "cornell": "Cornell University",

    # Other highly selective privates
    "mit": "Massachusetts Institute of Technology",
    "caltech": "California Institute of Technology",
    "stanford": "Stanford University",
    "uchicago": "University of Chicago",
    "chicago": "University of Chicago",
    "u chicago": "University of Chicago",
    "duke": "Duke University",
    "jhu": "Johns Hopkins University",
    "johns hopkins": "Johns Hopkins University",
    "hopkins": "Johns Hopkins University",
    "northwestern": "Northwestern University",
    "nu": "Northwestern University",
    "rice": "Rice University",
    "vanderbilt": "Vanderbilt University",
    "vandy": "Vanderbilt University",
    "washu": "Washington University in St Louis",
    "wustl": "Washington University in St Louis",
    "washington university": "Washington University in St Louis",
    "wash u": "Washington University in St Louis",
    "notre dame": "University of Notre Dame",
    "nd": "University of Notre Dame",
    "georgetown": "Georgetown University",
    "emory": "Emory University",
    "cmu": "Carnegie Mellon University",
    "carnegie mellon": "Carnegie Mellon University",
    "usc": "University of Southern California",
    "tufts": "Tufts University",
    "nyu": "New York University",
    "nyu stern": "New York University",
    "nyu tandon": "New York University",
    "nyu abu dhabi": "New York University",
    "bu": "Boston University",
    "boston u": "Boston University",
    "bc": "Boston College",
    "boston college": "Boston College",
    "northeastern": "Northeastern University",
    "neu": "Northeastern University",
    "brandeis": "Brandeis University",
    "case western": "Case Western Reserve University",
    "cwru": "Case Western Reserve University",
    "case": "Case Western Reserve University",
    "rochester": "University of Rochester",
    "u of r": "University of Rochester",
    "uofr": "University of Rochester",
    "wake forest": "Wake Forest University",
    "wfu": "Wake Forest University",
    "tulane": "Tulane University of Louisiana",
    "lehigh": "Lehigh University",
    "villanova": "Villanova University",
    "nova": "Villanova University",
    "gwu": "George Washington University",
    "gw": "George Washington University",
    "george washington": "George Washington University",
    "american": "American University",
    "au": "American University",
    "syracuse": "Syracuse University",
    "cuse": "Syracuse University",
    "fordham": "Fordham University",
    "smu": "Southern Methodist University",
    "tcu": "Texas Christian University",
    "baylor": "Baylor University",
    "miami": "University of Miami",
    "u miami": "University of Miami",
    "umiami": "University of Miami",
    "pepperdine": "Pepperdine University",
    "lmu": "Loyola Marymount University",
    "santa clara": "Santa Clara University",
    "scu": "Santa Clara University",
    "usd": "University of San Diego",
    "usf": "University of San Francisco",
    "chapman": "Chapman University",
    "drexel": "Drexel University",
    "rit": "Rochester Institute of Technology",
    "rpi": "Rensselaer Polytechnic Institute",
    "wpi": "Worcester Polytechnic Institute",
    "stevens": "Stevens Institute of Technology",
    "sit": "Stevens Institute of Technology",
    "olin": "Franklin W Olin College of Engineering",
    "cooper union": "Cooper Union for the Advancement of Science and Art",
    "gatech": "Georgia Institute of Technology-Main Campus",
    "georgia tech": "Georgia Institute of Technology-Main Campus",
    "gt": "Georgia Institute of Technology-Main Campus",
    "brigham young": "Brigham Young University",
    "byu": "Brigham Young University",
    "yeshiva": "Yeshiva University",
    "howard": "Howard University",
    "spelman": "Spelman College",
    "morehouse": "Morehouse College",
    "babson": "Babson College",
    "bentley": "Bentley University",
    "northeastern university": "Northeastern University",
    "case western reserve": "Case Western Reserve University",
    "carleton": "Carleton College",
    "st olaf": "St Olaf College",
    "st. olaf": "St Olaf College",
    "macalester": "Macalester College",
    "mac": "Macalester College",
    "grinnell": "Grinnell College",
    "oberlin": "Oberlin College",
    "kenyon": "Kenyon College",
    "denison": "Denison University",
    "depauw": "DePauw University",
    "wabash": "Wabash College",
    "rhodes": "Rhodes College",
    "sewanee": "The University of the South",
    "davidson": "Davidson College",
    "richmond": "University of Richmond",
    "u of richmond": "University of Richmond",
    "w&l": "Washington and Lee University",
    "wlu": "Washington and Lee University",
    "washington and lee": "Washington and Lee University",
    "w and l": "Washington and Lee University",
    "furman": "Furman University",
    "elon": "Elon University",
    "trinity": "Trinity College",
    "trinity university": "Trinity University",
    "fairfield": "Fairfield University",
    "quinnipiac": "Quinnipiac University",
    "marquette": "Marquette University",
    "loyola chicago": "Loyola University Chicago",
    "luc": "Loyola University Chicago",
    "depaul": "DePaul University",
    "creighton": "Creighton University",
    "slu": "Saint Louis University",
    "saint louis": "Saint Louis University",
    "gonzaga": "Gonzaga University",
    "seattle u": "Seattle University",
    "university of denver": "University of Denver",
    "du": "University of Denver",
    "colorado college": "Colorado College",
    "cc": "Colorado College",
    "reed": "Reed College",
    "whitman": "Whitman College",
    "occidental": "Occidental College",
    "oxy": "Occidental College",
    "pitzer": "Pitzer College",
    "scripps": "Scripps College",
    "cmc": "Claremont McKenna College",
    "claremont mckenna": "Claremont McKenna College",
    "hmc": "Harvey Mudd College",
    "harvey mudd": "Harvey Mudd College",
    "mudd": "Harvey Mudd College",
    "pomona": "Pomona College",

    # Liberal arts colleges
    "williams": "Williams College",
    "amherst": "Amherst College",
    "swarthmore": "Swarthmore College",
    "swat": "Swarthmore College",
    "wellesley": "Wellesley College",
    "bowdoin": "Bowdoin College",
    "middlebury": "Middlebury College",
    "midd": "Middlebury College",
    "colby": "Colby College",
    "bates": "Bates College",
    "hamilton": "Hamilton College",
    "haverford": "Haverford College",
    "bryn mawr": "Bryn Mawr College",
    "vassar": "Vassar College",
    "wesleyan": "Wesleyan University",
    "wes": "Wesleyan University",
    "colgate": "Colgate University",
    "barnard": "Barnard College",
    "smith": "Smith College",
    "mount holyoke": "Mount Holyoke College",
    "mhc": "Mount Holyoke College",
    "bucknell": "Bucknell University",
    "lafayette": "Lafayette College",
    "dickinson": "Dickinson College",
    "gettysburg": "Gettysburg College",
    "f&m": "Franklin and Marshall College",
    "franklin and marshall": "Franklin and Marshall College",
    "union": "Union College",
    "skidmore": "Skidmore College",
    "connecticut college": "Connecticut College",
    "conn college": "Connecticut College",
    "holy cross": "College of the Holy Cross",
    "wheaton": "Wheaton College",
    "bard": "Bard College",
    "sarah lawrence": "Sarah Lawrence College",
    "william and mary": "William & Mary",
    "william & mary": "William & Mary",
    "w&m": "William & Mary",
    "wm": "William & Mary",
    "college of william and mary": "William & Mary",

    # University of California
    "berkeley": "University of California-Berkeley",
    "uc berkeley": "University of California-Berkeley",
    "ucb": "University of California-Berkeley",
    "cal": "University of California-Berkeley",
    "ucla": "University of California-Los Angeles",
    "ucsd": "University of California-San Diego",
    "uc san diego": "University of California-San Diego",
    "ucsb": "University of California-Santa Barbara",
    "uc santa barbara": "University of California-Santa Barbara",
    "uci": "University of California-Irvine",
    "uc irvine": "University of California-Irvine",
    "ucd": "University of California-Davis",
    "uc davis": "University of California-Davis",
    "ucsc": "University of California-Santa Cruz",
    "uc santa cruz": "University of California-Santa Cruz",
    "ucr": "University of California-Riverside",
    "uc riverside": "University of California-Riverside",
    "ucm": "University of California-Merced",
    "uc merced": "University of California-Merced",

    # California State University and other California publics
    "cal poly": "California Polytechnic State University-San Luis Obispo",
    "cal poly slo": "California Polytechnic State University-San Luis Obispo",
    "slo": "California Polytechnic State University-San Luis Obispo",
    "cal poly pomona": "California State Polytechnic University-Pomona",
    "cpp": "California State Polytechnic University-Pomona",
    "sdsu": "San Diego State University",
    "san diego state": "San Diego State University",
    "sjsu": "San Jose State University",
    "san jose state": "San Jose State University",
    "sfsu": "San Francisco State University",
    "csulb": "California State University-Long Beach",
    "csu long beach": "California State University-Long Beach",
    "cal state long beach": "California State University-Long Beach",
    "long beach state": "California State University-Long Beach",
    "csuf": "California State University-Fullerton",
    "cal state fullerton": "California State University-Fullerton",
    "csun": "California State University-Northridge",

    # Flagship and large publics
    "umich": "University of Michigan-Ann Arbor",
    "umich lsa": "University of Michigan-Ann Arbor",
    "michigan": "University of Michigan-Ann Arbor",
    "u of m": "University of Michigan-Ann Arbor",
    "uva": "University of Virginia-Main Campus",
    "virginia": "University of Virginia-Main Campus",
    "unc": "University of North Carolina at Chapel Hill",
    "unc chapel hill": "University of North Carolina at Chapel Hill",
    "chapel hill": "University of North Carolina at Chapel Hill",
    "unc ch": "University of North Carolina at Chapel Hill",
    "ncsu": "North Carolina State University at Raleigh",
    "nc state": "North Carolina State University at Raleigh",
    "uiuc": "University of Illinois Urbana-Champaign",
    "illinois": "University of Illinois Urbana-Champaign",
    "u of i": "University of Illinois Urbana-Champaign",
    "uic": "University of Illinois Chicago",
    "ut austin": "The University of Texas at Austin",
    "ut": "The University of Texas at Austin",
    "texas": "The University of Texas at Austin",
    "utd": "The University of Texas at Dallas",
    "ut dallas": "The University of Texas at Dallas",
    "tamu": "Texas A & M University-College Station",
    "texas a&m": "Texas A & M University-College Station",
    "texas a & m": "Texas A & M University-College Station",
    "a&m": "Texas A & M University-College Station",
    "uh": "University of Houston",
    "ttu": "Texas Tech University",
    "texas tech": "Texas Tech University",
    "uw madison": "University of Wisconsin-Madison",
    "uw-madison": "University of Wisconsin-Madison",
    "wisconsin": "University of Wisconsin-Madison",
    "wisco": "University of Wisconsin-Madison",
    "uw": "University of Washington-Seattle Campus",
    "u of washington": "University of Washington-Seattle Campus",
    "uw seattle": "University of Washington-Seattle Campus",
    "udub": "University of Washington-Seattle Campus",
    "wsu": "Washington State University",
    "umd": "University of Maryland-College Park",
    "maryland": "University of Maryland-College Park",
    "umd college park": "University of Maryland-College Park",
    "umbc": "University of Maryland-Baltimore County",
    "umn": "University of Minnesota-Twin Cities",
    "minnesota": "University of Minnesota-Twin Cities",
    "u of m twin cities": "University of Minnesota-Twin Cities",
    "osu": "Ohio State University-Main Campus",
    "ohio state": "Ohio State University-Main Campus",
    "the ohio state university": "Ohio State University-Main Campus",
    "tosu": "Ohio State University-Main Campus",
    "oregon state": "Oregon State University",
    "uo": "University of Oregon",
    "uoregon": "University of Oregon",
    "penn state": "Pennsylvania State University-Main Campus",
    "psu": "Pennsylvania State University-Main Campus",
    "pitt": "University of Pittsburgh-Pittsburgh Campus",
    "upitt": "University of Pittsburgh-Pittsburgh Campus",
    "temple": "Temple University",
    "rutgers": "Rutgers University-New Brunswick",
    "rutgers nb": "Rutgers University-New Brunswick",
    "rutgers new brunswick": "Rutgers University-New Brunswick",
    "njit": "New Jersey Institute of Technology",
    "tcnj": "The College of New Jersey",
    "umass": "University of Massachusetts-Amherst",
    "umass amherst": "University of Massachusetts-Amherst",
    "umass boston": "University of Massachusetts-Boston",
    "uconn": "University of Connecticut",
    "uri": "University of Rhode Island",
    "uvm": "University of Vermont",
    "unh": "University of New Hampshire-Main Campus",
    "umaine": "University of Maine",
    "stony brook": "Stony Brook University",
    "sbu": "Stony Brook University",
    "binghamton": "Binghamton University",
    "suny binghamton": "Binghamton University",
    "bing": "Binghamton University",
    "buffalo": "University at Buffalo",
    "ub": "University at Buffalo",
    "suny buffalo": "University at Buffalo",
    "albany": "University at Albany",
    "suny albany": "University at Albany",
    "suny geneseo": "SUNY College at Geneseo",
    "geneseo": "SUNY College at Geneseo",
    "cuny baruch": "CUNY Bernard M Baruch College",
    "baruch": "CUNY Bernard M Baruch College",
    "hunter": "CUNY Hunter College",
    "cuny hunter": "CUNY Hunter College",
    "ccny": "CUNY City College",
    "vt": "Virginia Polytechnic Institute and State University",
    "virginia tech": "Virginia Polytechnic Institute and State University",
    "vtech": "Virginia Polytechnic Institute and State University",
    "jmu": "James Madison University",
    "james madison": "James Madison University",
    "gmu": "George Mason University",
    "george mason": "George Mason University",
    "vcu": "Virginia Commonwealth University",
    "uga": "University of Georgia",
    "georgia": "University of Georgia",
    "gsu": "Georgia State University",
    "uf": "University of Florida",
    "ufl": "University of Florida",
    "florida": "University of Florida",
    "fsu": "Florida State University",
    "florida state": "Florida State University",
    "ucf": "University of Central Florida",
    "fiu": "Florida International University",
    "usf tampa": "University of South Florida",
    "clemson": "Clemson University",
    "usc columbia": "University of South Carolina-Columbia",
    "south carolina": "University of South Carolina-Columbia",
    "uk": "University of Kentucky",
    "kentucky": "University of Kentucky",
    "utk": "The University of Tennessee-Knoxville",
    "tennessee": "The University of Tennessee-Knoxville",
    "ua": "The University of Alabama",
    "bama": "The University of Alabama",
    "alabama": "The University of Alabama",
    "auburn": "Auburn University",
    "ole miss": "University of Mississippi",
    "lsu": "Louisiana State University and Agricultural & Mechanical College",
    "arkansas": "University of Arkansas",
    "ou": "University of Oklahoma-Norman Campus",
    "oklahoma": "University of Oklahoma-Norman Campus",
    "ku": "University of Kansas",
    "kansas": "University of Kansas",
    "mizzou": "University of Missouri-Columbia",
    "iowa": "University of Iowa",
    "iowa state": "Iowa State University",
    "isu": "Iowa State University",
    "unl": "University of Nebraska-Lincoln",
    "nebraska": "University of Nebraska-Lincoln",
    "msu": "Michigan State University",
    "michigan state": "Michigan State University",
    "purdue": "Purdue University-Main Campus",
    "iu": "Indiana University-Bloomington",
    "iu bloomington": "Indiana University-Bloomington",
    "indiana": "Indiana University-Bloomington",
    "indiana university": "Indiana University-Bloomington",
    "cu boulder": "University of Colorado Boulder",
    "boulder": "University of Colorado Boulder",
    "colorado school of mines": "Colorado School of Mines",
    "mines": "Colorado School of Mines",
    "utah": "University of Utah",
    "u of u": "University of Utah",
    "asu": "Arizona State University Campus Immersion",
    "arizona state": "Arizona State University Campus Immersion",
    "u of a": "University of Arizona",
    "uarizona": "University of Arizona",
    "arizona": "University of Arizona",
    "unlv": "University of Nevada-Las Vegas",
    "unm": "University of New Mexico-Main Campus",
    "uh manoa": "University of Hawaii at Manoa",
    "delaware": "University of Delaware",
    "udel": "University of Delaware",
    "ud": "University of Delaware",
    "wvu": "West Virginia University",
    "miami of ohio": "Miami University-Oxford",
    "miami ohio": "Miami University-Oxford",
    "miami university": "Miami University-Oxford",
    "cincinnati": "University of Cincinnati-Main Campus",
    "uc cincinnati": "University of Cincinnati-Main Campus",
    "cwru ohio": "Case Western Reserve University",
}


def lookup_abbreviation(name):
    """Return the canonical name for a short school name, or ``None``.

    :param name: School name as written in a post.
    :type name: str
    :rtype: str or None
    """
    if not name:
        return None
    return SCHOOL_ABBREVIATIONS.get(" ".join(name.lower().split()))
