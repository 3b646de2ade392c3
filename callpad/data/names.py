"""
First-name gazetteer for caller name detection (lowercase).
"""

from __future__ import annotations

FIRST_NAMES: frozenset[str] = frozenset("""
aaron abby abigail adam adrian adriana aidan aiden alan albert alejandro alex alexa alexander
alexandra alexis alice alicia alison allison alma alyssa amanda amber amy ana andre andrea
andrew andy angel angela angelica angie anita ann anna anne annie anthony antonio april
ariana ariel arthur ashley aubrey audrey austin ava bailey barbara becky ben benjamin
bernard beth bethany betty beverly bill billy blake bob bobby bonnie brad bradley brady
brandi brandy brenda brent brett brian briana brianna bridget brittany brooke bruce bryan
bryce caleb cameron camila candace carl carla carlos carmen carol caroline carolyn carrie
casey cassandra catherine cathy cecilia chad charles charlie charlotte chase chelsea cheryl
chris christian christina christine christopher cindy claire clara claudia cody colin
connor corey courtney craig crystal curtis cynthia daisy dakota dale dan dana daniel
danielle danny darlene darren dave david dawn dean deborah debra denise dennis derek
desiree destiny devin diana diane diego dominic don donald donna doris dorothy douglas
drew dustin dylan eddie edgar eduardo edward elaine elena eli elijah elizabeth ella ellen
emily emma eric erica erik erika erin ernest esther ethan eugene eva evan evelyn faith
felicia fernando frances francisco frank gabriel gabriella gabrielle gail gary gavin gene
george gerald gina gloria grace grant greg gregory hailey haley hannah harold harry
heather hector heidi helen henry holly hope howard hunter ian irene isaac isabel isabella
isaiah ivan jack jackie jackson jacob jacqueline jade jaime jake james jamie jan jane janet
janice jared jasmine jason javier jay jean jeff jeffrey jenna jennifer jenny jeremy jerry
jesse jessica jesus jill jim jimmy jo joan joanna joe joel john johnny jon jonathan jordan
jorge jose joseph josh joshua joy joyce juan judith judy julia julian julie justin kaitlyn
karen karina kate katherine kathleen kathryn kathy katie kayla keith kelly kelsey ken
kendra kenneth kevin kim kimberly kristen kristin kristina kyle lance larry laura lauren
leah lee leslie lily linda lindsay lindsey lisa logan lori louis lucas lucy luis luke
lydia lynn mackenzie madeline madison maggie mallory marco marcus margaret maria mariah
marie marilyn mario marissa mark martha martin marvin mary mason matt matthew maureen max
maya megan melanie melissa melody mia michael michele michelle miguel mike miranda
molly monica morgan nancy natalie nathan nathaniel neil nicholas nick nicole noah nora
norma olivia omar oscar owen pam pamela patricia patrick paul paula peggy peter phillip
rachel ralph ramon randy raul ray raymond rebecca regina renee ricardo richard rick ricky
riley rita rob robert roberto robin rodney roger ron ronald rosa rose ruby russell ruth
ryan sabrina sally sam samantha samuel sandra sara sarah scott sean sergio seth shannon
sharon shawn shelby shirley sierra sofia sophia stacy stephanie stephen steve steven sue
susan sydney tamara tammy tanya tara taylor teresa terry thomas tiffany tim timothy tina
todd tom tommy tony tracy travis trevor tristan troy tyler valerie vanessa veronica
victor victoria vincent virginia walter wanda wayne wendy william willie wyatt xavier
yolanda yvonne zachary zoe
""".split())
